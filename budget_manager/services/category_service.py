import re

from budget_manager.database.category_dao import CategoryDAO
from budget_manager.models.category import Category
from budget_manager.services.errors import ValidationError
from budget_manager.utils.constants import CATEGORY_KINDS, DEFAULT_CATEGORY_COLOR

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_id(self, category_id: int) -> Category | None:
        return self._dao.get_by_id(category_id)

    def get_by_kind(self, kind: str) -> list[Category]:
        self._validate_kind(kind)
        return self._dao.get_by_kind(kind)

    def create(self, name: str, kind: str, color_hex: str = DEFAULT_CATEGORY_COLOR) -> Category:
        name = self._clean_name(name)
        self._validate_kind(kind)
        color_hex = self._clean_color(color_hex)
        if self._dao.get_by_name(name):
            raise ValidationError(f"A category named '{name}' already exists.")
        return self._dao.create(name, kind, color_hex)

    def update(self, category_id: int, name: str, kind: str, color_hex: str) -> Category:
        current = self._dao.get_by_id(category_id)
        if current is None:
            raise ValidationError(f"Category {category_id} does not exist.")
        name = self._clean_name(name)
        self._validate_kind(kind)
        color_hex = self._clean_color(color_hex)
        existing = self._dao.get_by_name(name)
        if existing and existing.id != category_id:
            raise ValidationError(f"A category named '{name}' already exists.")
        # Rename/recolor is always fine; switching kind would orphan the rows using it
        if kind != current.kind and self._dao.is_referenced(category_id):
            raise ValidationError(
                "Cannot change the type of a category that has transactions or budgets."
            )
        return self._dao.update(category_id, name, kind, color_hex)

    def delete(self, category_id: int) -> bool:
        """Delete the category and, by cascade, its expenses, income and budgets."""
        return self._dao.delete(category_id)

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _clean_name(name: str) -> str:
        if name is not None and not isinstance(name, str):
            raise ValidationError("Category name must be text.")
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name cannot be empty.")
        return name

    @staticmethod
    def _validate_kind(kind: str):
        if kind not in CATEGORY_KINDS:
            raise ValidationError(
                f"Invalid category type '{kind}'. "
                f"Must be one of: {', '.join(CATEGORY_KINDS)}."
            )

    @staticmethod
    def _clean_color(color_hex: str) -> str:
        if color_hex is not None and not isinstance(color_hex, str):
            raise ValidationError(f"Invalid color {color_hex!r}. Use #RRGGBB.")
        color = (color_hex or DEFAULT_CATEGORY_COLOR).strip()
        if not color.startswith("#"):
            color = "#" + color
        if not _HEX_COLOR.match(color):
            raise ValidationError(f"Invalid color '{color_hex}'. Use #RRGGBB.")
        return color
