from svggloo.cli import main

raise SystemExit(main())
