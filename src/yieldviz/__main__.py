from yieldviz.cli import main

raise SystemExit(main())
