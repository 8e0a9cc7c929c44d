"""Entry point for 'python -m filegate' command."""

from filegate.cli import main

if __name__ == "__main__":
    main()
