"""Entry point for 'python -m captiveportal'."""

from captiveportal.cli import main

if __name__ == "__main__":
    main()
