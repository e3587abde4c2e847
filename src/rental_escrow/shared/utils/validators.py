def to_uint(v: object) -> int:
    """任意の値を非負整数に変換する

    Pydantic の field_validator (mode="before") から呼び出すことを想定。
    uint256 は JSON の数値精度を超えるため、10進数文字列も受け付ける。
    bool と小数表記は拒否する。
    """
    if isinstance(v, bool):
        raise ValueError("Boolean is not a valid amount")
    if isinstance(v, int):
        value = v
    elif isinstance(v, str) and v.strip().isdigit():
        value = int(v.strip())
    else:
        raise ValueError(f"Expected a non-negative integer, got {v!r}")
    if value < 0:
        raise ValueError("Value cannot be negative")
    return value
