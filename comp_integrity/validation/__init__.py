"""Field, business-rule and data-quality validation stages."""

from comp_integrity.validation.business import validate_business_rules
from comp_integrity.validation.fields import validate_field, validate_fields
from comp_integrity.validation.quality import assess_data_quality
from comp_integrity.validation.reporters import format_report
from comp_integrity.validation.suggestions import build_summary, generate_suggestions, quality_grade, quality_status
