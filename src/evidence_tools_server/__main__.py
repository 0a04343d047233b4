"""Module entrypoint.

Allows:
    python -m evidence_tools_server
"""

from __future__ import annotations

from evidence_tools_server.server.evidence_server import main

if __name__ == "__main__":
    main()
