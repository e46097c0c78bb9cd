from localcov.inputs.cobertura import read_cobertura
from localcov.inputs.coveragepy import read_coverage_data
from localcov.inputs.lcov import read_tracefile, write_tracefile

__all__ = ["read_cobertura", "read_coverage_data", "read_tracefile", "write_tracefile"]
