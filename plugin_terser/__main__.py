"""Allow plugin-terser to be run as a module with `python -m plugin_terser`."""

from .cli import main

if __name__ == "__main__":
    main()
