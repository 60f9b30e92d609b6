import sys

from url_enrichment.cli import main

sys.exit(main())
