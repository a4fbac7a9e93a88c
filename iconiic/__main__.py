from iconiic.cli import main

raise SystemExit(main())
