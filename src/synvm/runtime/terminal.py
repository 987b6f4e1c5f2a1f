import sys
from typing import TextIO


class Console():
    ''' Line-buffered character source and unbuffered character sink '''

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        prompt: str = ''
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.prompt = prompt

    def read_line(self) -> str:
        # Blocks until a full line (or EOF) is available
        if self.prompt:
            self.stdout.write(self.prompt)
            self.stdout.flush()

        return self.stdin.readline()

    def write(self, char: str):
        self.stdout.write(char)
        self.stdout.flush()
