"""
MySh entry point.

Usage:
    mysh [script]

With a script argument, lines are read from the file. Otherwise they are
read from stdin, interactively when stdin is a terminal.
"""

import sys
from typing import List, Optional

from mysh.core.config_loader import ConfigLoader
from mysh.exceptions import ConfigError
from mysh.logger import Logger, LogLevel
from mysh.shell.shell import Shell


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for MySh.

    Startup sequence:
    1. Load configuration (MYSH_CONFIG, if set)
    2. Initialize logging
    3. Run the read loop over stdin or the script file
    """
    argv = sys.argv[1:] if argv is None else argv

    if len(argv) > 1:
        print("usage: mysh [script]", file=sys.stderr)
        return 2

    try:
        config = ConfigLoader().load_from_env()
        level = LogLevel.from_name(config.logging.level)
    except (ConfigError, ValueError) as e:
        print(f"mysh: {e}", file=sys.stderr)
        return 1

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output
    )

    if argv:
        shell = Shell(config=config, interactive=False)
        try:
            return shell.run_script(argv[0])
        except OSError as e:
            print(f"Error opening script file: {argv[0]}: {e.strerror}", file=sys.stderr)
            return 1

    shell = Shell(config=config, interactive=sys.stdin.isatty())
    try:
        return shell.run()
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
