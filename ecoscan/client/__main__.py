from ecoscan.client.cli import main

raise SystemExit(main())
