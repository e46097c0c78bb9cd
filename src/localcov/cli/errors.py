# mirror <sysexits.h>
EXIT_OK = 0  # Normal success (target met)
EXIT_GENERIC = 1  # Generic failure; also "target coverage not met"
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed tracefile)
EXIT_NOINPUT = 66  # Input file not found (e.g., .coverage missing)
EXIT_UNAVAILABLE = 69  # External tool missing or failing (genhtml, lcov_cobertura)
EXIT_SOFTWARE = 70  # The test suite failed while collecting coverage
EXIT_CONFIG = 78  # Invalid configuration (e.g., bad [tool.localcov])
