#!/usr/bin/env python3
"""
S256Code Runner
This script provides a convenient way to run the tool from a source checkout.
"""

import os
import sys

# Make the s256code package importable without installing it
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

def print_usage():
    """Print usage information"""
    print("""
S256Code - PKCE codeVerifier / S256 challenge tool (RFC 7636)

Usage:
    ./run.py [options]

Options:
    --generate           Generate a codeVerifier and S256 hash without prompting
    --verifier VALUE     Calculate the S256 hash of VALUE without prompting
    --entropy N          Random bytes used for generation (32-96, default 64)
    --log-file PATH      Path to log file
    --verbose            Enable verbose logging

Without --generate or --verifier an interactive menu is shown:
    0. Exit
    1. Generate a codeVerifier and S256 hash
    2. Calculate hash from codeVerifier

Environment:
    S256CODE_ENTROPY, S256CODE_LOG_LEVEL, S256CODE_LOG_FILE (also read from .env)

Example:
    ./run.py --verifier dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk
""")

if "--help" in sys.argv or "-h" in sys.argv:
    print_usage()
    sys.exit(0)

from s256code.main import main

if __name__ == "__main__":
    sys.exit(main())
