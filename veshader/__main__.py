# veshader/__main__.py
from veshader.cli import main

raise SystemExit(main())
