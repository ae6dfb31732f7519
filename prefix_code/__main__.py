from prefix_code.cli import main

raise SystemExit(main())
