import sys
from ipapi.cli import main

sys.exit(main())
