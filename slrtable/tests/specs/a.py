# Left recursive sums of identifiers.
grammar = {
    "E": ["E + T", "T"],
    "T": ["id"],
}
