import sys

from issuebot.main import main

sys.exit(main())
