import sys

from weather_poller.main import main

sys.exit(main())
