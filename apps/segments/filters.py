"""Segment filter evaluation.

A segment is a conjunction of conditions over ``Record.data``. A condition on
a key the record does not have never matches, whatever the operator.
``equals``/``notEquals`` compare exactly; the other operators ignore case.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Sequence


class InvalidFilterCondition(ValueError):
    pass


class Operator(str, Enum):
    EQUALS = 'equals'
    NOT_EQUALS = 'notEquals'
    CONTAINS = 'contains'
    NOT_CONTAINS = 'notContains'
    STARTS_WITH = 'startsWith'
    ENDS_WITH = 'endsWith'

    @classmethod
    def choices(cls):
        return [operator.value for operator in cls]


@dataclass(frozen=True)
class FilterCondition:
    field: str
    operator: Operator
    value: str

    @classmethod
    def from_dict(cls, raw: Mapping) -> 'FilterCondition':
        if not isinstance(raw, Mapping):
            raise InvalidFilterCondition('Filter condition must be an object')

        field_name = raw.get('field')
        value = raw.get('value', '')
        if not isinstance(field_name, str) or not field_name:
            raise InvalidFilterCondition('Filter condition field must be a non-empty string')
        if not isinstance(value, str):
            raise InvalidFilterCondition('Filter condition value must be a string')

        try:
            operator = Operator(raw.get('operator'))
        except ValueError:
            raise InvalidFilterCondition(f"Unknown operator: {raw.get('operator')!r}")

        return cls(field=field_name, operator=operator, value=value)

    def to_dict(self):
        return {'field': self.field, 'operator': self.operator.value, 'value': self.value}


def parse_conditions(raw_conditions: Iterable[Mapping]) -> List[FilterCondition]:
    return [FilterCondition.from_dict(raw) for raw in raw_conditions]


def _case_insensitive(operator: Operator, field_value: str, value: str) -> bool:
    field_value = field_value.lower()
    value = value.lower()
    if operator is Operator.CONTAINS:
        return value in field_value
    if operator is Operator.NOT_CONTAINS:
        return value not in field_value
    if operator is Operator.STARTS_WITH:
        return field_value.startswith(value)
    if operator is Operator.ENDS_WITH:
        return field_value.endswith(value)
    return False


def matches_condition(data: Mapping[str, str], condition: FilterCondition) -> bool:
    if condition.field not in data:
        return False
    field_value = data[condition.field]
    if field_value is None:
        return False
    field_value = str(field_value)

    if condition.operator is Operator.EQUALS:
        return field_value == condition.value
    if condition.operator is Operator.NOT_EQUALS:
        return field_value != condition.value
    return _case_insensitive(condition.operator, field_value, condition.value)


def matches_all(data: Mapping[str, str], conditions: Sequence[FilterCondition]) -> bool:
    return all(matches_condition(data, condition) for condition in conditions)


def _record_data(record) -> Mapping[str, str]:
    # ORM records keep their fields under .data, plain mappings are the data
    if isinstance(record, Mapping):
        return record
    return record.data


def filter_records(records: Iterable, conditions: Sequence[FilterCondition]) -> list:
    """Records satisfying every condition, in input order."""
    return [record for record in records if matches_all(_record_data(record), conditions)]
