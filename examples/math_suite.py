from minicase import IndividualTest, TestCase
from minicase import assertions as check


def _division(test):
    check.almost_equal(1 / 3, 0.3333333)
    check.raises(lambda: 1 / 0)


math_case = TestCase(
    "Math",
    [
        IndividualTest("Addition", lambda: check.equal(2 + 2, 4)),
        IndividualTest(
            "Ordering",
            [
                lambda: check.less(1, 2),
                lambda: check.greater_equal(2, 2),
                lambda: check.not_equal(1, 2),
            ],
        ),
        IndividualTest("Division", _division),
    ],
)

text_case = TestCase(
    "Text",
    [
        IndividualTest("Upper", lambda: check.equal("abc".upper(), "ABC")),
        IndividualTest("Empty", lambda: check.falsy("".strip())),
    ],
)
