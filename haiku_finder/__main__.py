from haiku_finder.app.cli import main

raise SystemExit(main())
