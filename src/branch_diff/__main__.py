from branch_diff.cli import main

raise SystemExit(main())
