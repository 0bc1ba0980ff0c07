import sys

from carregistry.cli import main

sys.exit(main())
