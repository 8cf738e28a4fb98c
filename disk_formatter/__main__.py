import sys

from disk_formatter.main import main


sys.exit(main())
