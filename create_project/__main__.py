"""Allow ``python -m create_project``."""

from create_project.cli import main

if __name__ == "__main__":
    main()
