#!/usr/bin/env python3
from homesite.cli import main

if __name__ == "__main__":
    main()
