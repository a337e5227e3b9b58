import sys

from resource_manifests.cli import main

sys.exit(main())
