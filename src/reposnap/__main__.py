from __future__ import annotations

import sys

from reposnap.main import main

sys.exit(main())
