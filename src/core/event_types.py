"""이벤트 유형 상수

아이템 엔진이 발행하거나 구독하는 이벤트.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # map (호스트 → 엔진)
    UNIT_MOVED = "unit_moved"

    # ground trigger / transfer (엔진 → 호스트 UI)
    ITEM_PICK = "item_pick"

    # item
    ITEM_TRANSFERRED = "item_transferred"
    ITEM_EQUIPPED = "item_equipped"
    ITEM_UNEQUIPPED = "item_unequipped"
