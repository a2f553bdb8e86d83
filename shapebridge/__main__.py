import sys

from shapebridge.adapters.discord.launcher import main

sys.exit(main())
