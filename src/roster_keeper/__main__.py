# src/roster_keeper/__main__.py

from .cli.main import main

main()
