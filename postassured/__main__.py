"""
Entry point for running postassured as a module.

Usage: python -m postassured [COMMAND] [OPTIONS]

Examples:
    python -m postassured convert collection.json ./generated
    python -m postassured convert collection.json ./generated --no-allure
    python -m postassured inspect collection.json
"""

from .main import main

if __name__ == '__main__':
    main()
