"""아이템 엔진 예외

모두 호출자 버그/데이터 오류를 뜻한다. 엔진 내부에서 잡지 않는다.
"""


class ItemError(Exception):
    """아이템 엔진 예외 기반 클래스"""


class NotFoundError(ItemError, LookupError):
    """item_number가 카탈로그에 없음. 기본값 아이템은 없다."""

    def __init__(self, item_number: int) -> None:
        self.item_number = item_number
        super().__init__(f"Item #{item_number} not found in item catalog")


class ImmutableRegistryError(ItemError, TypeError):
    """Registry 쓰기 시도."""

    def __init__(self) -> None:
        super().__init__("Item type registry is read-only")


class MissingCraftedCategoryError(ItemError, ValueError):
    """제작 아이템(weaponword/armourword)을 category 없이 장착하려 함."""

    def __init__(self, item_number: int) -> None:
        self.item_number = item_number
        super().__init__(
            f"Item #{item_number} is crafted, "
            "but required parameter 'category' hasn't been provided"
        )
