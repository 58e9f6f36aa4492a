from snig.cli import main

raise SystemExit(main())
