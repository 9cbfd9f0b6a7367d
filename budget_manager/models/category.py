from dataclasses import dataclass


@dataclass
class Category:
    id: int
    name: str
    kind: str           # 'expense' | 'income'
    color_hex: str = "#3498db"
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind,
            "color": self.color_hex,
        }
