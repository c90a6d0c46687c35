"""Usage: python -m dem_pipeline <order_zip> [output_dir]"""

import sys

from dem_pipeline.cli import main

sys.exit(main())
