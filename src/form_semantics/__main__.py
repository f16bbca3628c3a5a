# Entry point for running the package as a module
# Allows execution via: python -m form_semantics

from form_semantics.cli import app

if __name__ == "__main__":
    app()
