"""Run the task bot with ``python -m src.telegram``."""

from src.telegram.polling import main

if __name__ == "__main__":
    main()
