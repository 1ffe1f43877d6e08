from typing import Callable, Optional
from rich.console import Console
from .utils.errors import VerifierValidationError
from .utils.pkce import CodeVerifier, DEFAULT_ENTROPY, derive, generate, validate

BANNER = "S256Code - v.1.0"
EXIT, GENERATE, CUSTOM = 0, 1, 2
MENU = {
    EXIT: "Exit",
    GENERATE: "Generate a codeVerifier and S256 hash",
    CUSTOM: "Calculate hash from codeVerifier",
}

class InteractiveShell:
    """Menu driven prompt around the PKCE functions"""

    def __init__(
        self,
        console: Optional[Console] = None,
        logger=None,
        entropy_bytes: int = DEFAULT_ENTROPY,
        read_line: Optional[Callable[[str], str]] = None
    ):
        self.console = console or Console()
        self.logger = logger
        self.entropy_bytes = entropy_bytes
        self.read_line = read_line or self.console.input

    def _print(self, text: str = ""):
        # Verifier values and the regexp contain "[" which rich would read as markup
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def show_menu(self):
        self._print(BANNER)
        self._print()
        for choice, label in MENU.items():
            self._print(f"{choice}. {label}")

    def read_choice(self) -> int:
        """Prompt until the user enters one of the menu numbers"""
        while True:
            self._print()
            line = self.read_line("Choice ? ")
            try:
                choice = int(line.strip())
            except ValueError:
                self._print("Number expected")
                continue
            if choice not in MENU:
                self._print("Unknown choice")
                continue
            return choice

    def read_verifier(self) -> CodeVerifier:
        """Prompt until the user enters a valid code verifier"""
        while True:
            self._print()
            line = self.read_line("codeVerifier ? ")
            try:
                return validate(line)
            except VerifierValidationError as e:
                if self.logger:
                    self.logger.debug(f"Rejected codeVerifier: {type(e).__name__}")
                self._print(str(e))

    def print_pair(self, verifier: CodeVerifier):
        challenge = derive(verifier)
        if self.logger:
            self.logger.debug(f"Derived {challenge.method} challenge {challenge.value}")
        self._print(f"codeVerifier = {verifier}")
        self._print(f"challenge    = {challenge}")

    def run(self) -> int:
        """Show the menu, execute one choice and return the exit code"""
        self.show_menu()
        try:
            choice = self.read_choice()
            if choice == GENERATE:
                self.print_pair(generate(self.entropy_bytes))
            elif choice == CUSTOM:
                self.print_pair(self.read_verifier())
        except EOFError:
            if self.logger:
                self.logger.info("End of input, exiting")
            self._print()
        return 0
