# mirror <sysexits.h> where a specific code exists
EXIT_OK = 0  # Normal success, including "no flaky tests"
EXIT_IOERR = 1  # A log file could not be opened or read
EXIT_USAGE = 2  # Bad command line (raised by click itself)
EXIT_CONFIG = 78  # Invalid [tool.flaketrack] configuration
