"""
Відображення рядків результату SQL-запиту на JSON-подібні словники.

Схема відношення — це впорядкований список полів ``(ім'я, тип)``.
Поле ``i`` схеми застосовується до стовпця ``i`` рядка, імена стовпців
у запиті ролі не відіграють.
"""
from collections import namedtuple

from tunebox.errors import RelationMismatch

Field = namedtuple('Field', ['name', 'type'])


class Relation:
    def __init__(self, *fields):
        self._fields = tuple(Field(name, type_) for name, type_ in fields)

    @property
    def fields(self):
        return self._fields

    def convert_row(self, row):
        """Перетворює один рядок на словник, перевіряючи кількість стовпців."""
        values = tuple(row)
        if len(values) != len(self._fields):
            raise RelationMismatch(
                f"expected {len(self._fields)} columns "
                f"({', '.join(f.name for f in self._fields)}), got {len(values)}")
        return {
            field.name: None if value is None else field.type(value)
            for field, value in zip(self._fields, values)
        }

    def convert_to_optional(self, result):
        """Перший рядок результату або ``None``, якщо рядків немає."""
        row = result.first()
        if row is None:
            return None
        return self.convert_row(row)

    def convert_to_list(self, result):
        return [self.convert_row(row) for row in result]


USER = Relation(
    ("id", int),
    ("username", str),
    ("password", str),
    ("is_superuser", bool),
    ("first_name", str),
    ("last_name", str),
    ("email", str),
    ("is_active", bool),
    ("is_musician", int),
)

MUSIC = Relation(
    ("music_id", int),
    ("musician", str),
    ("music_name", str),
    ("music_path", str),
    ("is_active", bool),
)

COMMENT = Relation(
    ("comment_id", int),
    ("username", str),
    ("comment_time", str),
    ("comment_content", str),
)
