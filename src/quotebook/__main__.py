"""Main entry point for the quotebook package."""

from quotebook.cli import main

if __name__ == "__main__":
    main()
