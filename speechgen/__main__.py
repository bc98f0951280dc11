import sys

from speechgen.pipeline import main

sys.exit(main())
