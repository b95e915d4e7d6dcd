from hexoed.main import main

raise SystemExit(main())
