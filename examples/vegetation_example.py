"""Builds an ID3 tree for the vegetation survey table and prints its rules.

The dataset has seven survey sites. `vegetation` is the label; `stream`,
`slope`, and `elevation` are the candidate features; `id` identifies a site
and is never used for splitting.

Run with SPLIT-level logging to watch the builder choose each split.
"""

from id3tree import Dataset, build_tree, enable_logging, entropy, extract_rules, probability

vegetation = Dataset.from_columns(
    {
        "id": [1, 2, 3, 4, 5, 6, 7],
        "stream": [False, True, True, False, False, True, True],
        "slope": ["steep", "moderate", "steep", "steep", "flat", "steep", "steep"],
        "elevation": ["high", "low", "medium", "medium", "high", "highest", "high"],
        "vegetation": ["chapparal", "riparian", "riparian", "chapparal", "conifer", "conifer", "chapparal"],
    },
    target="vegetation",
    identifier="id",
)

print(f"P(elevation = high) = {probability(vegetation, 'elevation', 'high'):.4f}")
print(f"H(vegetation) = {entropy(vegetation, 'vegetation'):.4f} bits\n")

with enable_logging(level="SPLIT"):
    tree = build_tree(vegetation)

for rule in extract_rules(tree):
    print(rule)
