from appgen.cli import main

raise SystemExit(main())
