from mlpublish.app.cli import main

raise SystemExit(main())
