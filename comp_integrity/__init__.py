"""Data integrity checks for employee compensation records."""

from comp_integrity.checker import IntegrityChecker, validate_dataset
from comp_integrity.cleaning import clean_data
from comp_integrity.config import ConfigError, QualityWeights, ValidationPolicy, load_validation_policy
from comp_integrity.history import ValidationHistory
from comp_integrity.models import EmployeeRecord, Issue, Salary, ValidationReport
