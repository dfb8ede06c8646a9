from __future__ import annotations

import os

os.environ.setdefault("PAGED_SELECTION_DISABLE_CONSOLE", "1")
