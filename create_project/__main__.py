import sys

from create_project.cli import main

sys.exit(main())
