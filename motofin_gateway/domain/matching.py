"""Edit distance used for fuzzy category matching"""


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or substitutions
    needed to turn `a` into `b`.

    Table has len(b)+1 rows and len(a)+1 columns; row and column 0 hold the index.
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],  # substitution
                    matrix[i][j - 1],  # insertion
                    matrix[i - 1][j],  # deletion
                )

    return matrix[len(b)][len(a)]
