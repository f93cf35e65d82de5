from storeverity.cli import main

raise SystemExit(main())
