from __future__ import annotations

from httpfmt.main import main

raise SystemExit(main())
