from procrunner.cli import main

raise SystemExit(main())
