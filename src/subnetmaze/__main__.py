"""Allow running the package with python -m subnetmaze (same as the subnetmaze console script)."""
from subnetmaze.main import main
import sys
sys.exit(main())
