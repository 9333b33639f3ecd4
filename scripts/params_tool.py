from __future__ import annotations

from vetogov.core.params.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
