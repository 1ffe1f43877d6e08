import argparse
import sys
from typing import List, Optional
from pydantic import ValidationError
from rich.console import Console
from .shell import InteractiveShell
from .utils.config import ConfigLoader
from .utils.errors import CryptoUnavailableError, EntropyError, VerifierValidationError
from .utils.logger import get_logger
from .utils.pkce import PKCEPair

class S256CodeTool:
    """Runs one generate/derive operation, interactively or from flags"""

    def __init__(self, args, console: Optional[Console] = None):
        self.args = args
        self.config = ConfigLoader().get_config()
        # Command line flags win over environment settings
        if args.entropy is not None:
            self.config.entropy_bytes = args.entropy
        if args.log_file:
            self.config.log_file = args.log_file
        self.logger = get_logger(
            level="DEBUG" if args.verbose else self.config.log_level,
            log_file=self.config.log_file,
            verbose=args.verbose
        )
        self.console = console or Console()

    def print_pair(self, pair: PKCEPair):
        self.console.print(f"codeVerifier = {pair.verifier}", markup=False, highlight=False, soft_wrap=True)
        self.console.print(f"challenge    = {pair.challenge}", markup=False, highlight=False, soft_wrap=True)

    def run(self) -> int:
        """Dispatch to the requested mode and map errors to exit codes"""
        try:
            if self.args.generate:
                self.logger.section("Generating codeVerifier")
                pair = PKCEPair.create(self.config.entropy_bytes)
                self.logger.success(f"Generated {len(pair.verifier.value)} character codeVerifier")
                self.print_pair(pair)
                return 0
            if self.args.verifier is not None:
                self.logger.section("Deriving challenge")
                pair = PKCEPair.from_verifier(self.args.verifier)
                self.print_pair(pair)
                return 0
            shell = InteractiveShell(
                console=self.console,
                logger=self.logger,
                entropy_bytes=self.config.entropy_bytes
            )
            return shell.run()

        except VerifierValidationError as e:
            self.logger.failure(f"Invalid codeVerifier: {e}")
            return 1
        except EntropyError as e:
            self.logger.failure(f"Cannot generate codeVerifier: {e}")
            return 1
        except CryptoUnavailableError as e:
            self.logger.critical(f"Cryptographic primitive unavailable: {e}", exc_info=self.args.verbose)
            return 2
        except KeyboardInterrupt:
            self.logger.warning("Interrupted by user.")
            return 130
        finally:
            self.logger.close()

def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Generate a PKCE codeVerifier and its S256 challenge (RFC 7636)"
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--generate",
        action="store_true",
        help="Generate a codeVerifier and S256 hash without prompting"
    )
    mode.add_argument(
        "--verifier",
        metavar="VALUE",
        help="Calculate the S256 hash of the given codeVerifier without prompting"
    )
    parser.add_argument(
        "--entropy",
        type=int,
        help="Number of random bytes used to generate a codeVerifier (32-96, default 64)"
    )
    parser.add_argument(
        "--log-file",
        help="Path to log file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    try:
        tool = S256CodeTool(args)
    except ValidationError as e:
        Console(stderr=True).print(f"Invalid configuration: {e}", markup=False)
        return 1
    except OSError as e:
        Console(stderr=True).print(f"Cannot open log file: {e}", markup=False)
        return 1
    return tool.run()

if __name__ == "__main__":
    sys.exit(main())
