"""Allow ``python -m imgconv``."""

from imgconv.cli.main import run

if __name__ == "__main__":
    run()
