from metamath_blueprints.cli import main

raise SystemExit(main())
