"""Allow ``python -m okta_browser``."""

from okta_browser.cli import main

if __name__ == "__main__":
    main()
