"""Entry point for 'python -m collectionstore'."""

from collectionstore.cli import main

if __name__ == "__main__":
    main()
