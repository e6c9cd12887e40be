"""
Ordinals and Recurrence Text

Pure functions that turn schedule numbers and codes into short English
phrases such as "Due on the 19th each month".
"""


FREQUENCY_PHRASES = {
    "monthly": "each month",
    "bi-monthly": "every two months",
    "quarterly": "each quarter",
    "semi-annually": "twice a year",
    "yearly": "each year",
}


def ordinal_suffix(n: int) -> str:
    """
    Return n followed by its English ordinal suffix.

    11-13 (mod 100) are always "th"; otherwise the last digit decides.
    The sign is kept: -1 -> "-1st".

    Example:
        >>> ordinal_suffix(21)
        '21st'
        >>> ordinal_suffix(112)
        '112th'
    """
    abs_n = abs(n)
    if 11 <= abs_n % 100 <= 13:
        return f"{n}th"

    last_digit = abs_n % 10
    if last_digit == 1:
        return f"{n}st"
    elif last_digit == 2:
        return f"{n}nd"
    elif last_digit == 3:
        return f"{n}rd"
    return f"{n}th"


def frequency_phrase(code: str) -> str:
    """
    Map a recurrence code to prose.

    Unknown codes are returned unchanged so new server-side frequencies
    still render as something readable.
    """
    return FREQUENCY_PHRASES.get(code, code)


def recurrence_sentence(day_of_month: int, frequency_code: str) -> str:
    """
    Example:
        >>> recurrence_sentence(19, "monthly")
        'Due on the 19th each month'
    """
    return f"Due on the {ordinal_suffix(day_of_month)} {frequency_phrase(frequency_code)}"
