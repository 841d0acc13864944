from __future__ import annotations

from go_import_finder._main import main

if __name__ == "__main__":
    raise SystemExit(main())
