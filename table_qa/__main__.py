"""Entry point for ``python -m table_qa``."""

from .main import main

if __name__ == '__main__':
    main()
