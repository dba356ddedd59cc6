import sys

from territory_map.main import main

sys.exit(main())
