"""All tags and kinds used across subsystem boundaries.

CRITICAL: SchemaType is a closed set. There is no "any" or "unknown"
variant - an unrecognised tag is a schema bug and is reported as
UNSUPPORTED_TYPE, never silently accepted.
"""

from enum import Enum


class SchemaType(str, Enum):
    """Discriminant tag of a schema variant.

    Uses (str, Enum) because this IS the serialized form in plain-data
    schemas (the ``type`` key).
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class ErrorKind(str, Enum):
    """Kind of a validation or schema failure.

    Uses (str, Enum) so kinds can be shown and compared as plain text
    by callers mapping failures onto their own protocols.

    Values:
        MISSING_VALUE: Value is None and the schema is not nullable
        TYPE_MISMATCH: Runtime type does not match the schema variant
        LENGTH_TOO_SHORT: String or array shorter than minLength
        LENGTH_TOO_LONG: String or array longer than maxLength
        PATTERN_MISMATCH: String does not match regex
        INVALID_DATE: String does not parse with dateFormat
        AFFIX_MISMATCH: startsWith/endsWith not satisfied
        CONTAINMENT_MISMATCH: includes not satisfied
        NOT_IN_ALLOW_LIST: Value absent from ``in``
        IN_DENY_LIST: Value present in ``notIn``
        BELOW_MINIMUM: Number below min
        ABOVE_MAXIMUM: Number above max
        PREDICATE_UNSATISFIED: some/every/none predicate failed
        UNSUPPORTED_TYPE: Schema carries an unknown type tag
        INVALID_SCHEMA: Plain-data schema has malformed fields
    """

    MISSING_VALUE = "missing_value"
    TYPE_MISMATCH = "type_mismatch"
    LENGTH_TOO_SHORT = "length_too_short"
    LENGTH_TOO_LONG = "length_too_long"
    PATTERN_MISMATCH = "pattern_mismatch"
    INVALID_DATE = "invalid_date"
    AFFIX_MISMATCH = "affix_mismatch"
    CONTAINMENT_MISMATCH = "containment_mismatch"
    NOT_IN_ALLOW_LIST = "not_in_allow_list"
    IN_DENY_LIST = "in_deny_list"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    PREDICATE_UNSATISFIED = "predicate_unsatisfied"
    UNSUPPORTED_TYPE = "unsupported_type"
    INVALID_SCHEMA = "invalid_schema"


class PredicateName(str, Enum):
    """Element predicates an array schema may declare."""

    SOME = "some"
    EVERY = "every"
    NONE = "none"
