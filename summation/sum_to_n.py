"""Three ways to add up the integers 1..n.

All of them return 0 when n <= 0.
"""


def sum_to_n_a(n: int) -> int:
    """
    Closed form (Gauss): n * (n + 1) / 2.

    O(1) time and space; computes the result directly.
    """
    if n <= 0:
        return 0
    return n * (n + 1) // 2


def sum_to_n_b(n: int) -> int:
    """
    Iterative accumulation.

    O(n) time, O(1) space.
    """
    total = 0
    for i in range(1, n + 1):
        total += i
    return total


def sum_to_n_c(n: int) -> int:
    """
    Recursive: n + sum_to_n_c(n - 1).

    O(n) time and O(n) stack; raises RecursionError once n passes the
    interpreter's recursion limit.
    """
    if n <= 0:
        return 0
    return n + sum_to_n_c(n - 1)
