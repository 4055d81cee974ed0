from azdo_sdkgen.cli import main

raise SystemExit(main())
