"""py-memsim — a contiguous memory allocation simulator.

Memory is a row of slots; processes claim contiguous runs of them using
first-fit, best-fit or worst-fit placement, give them back, and the
pool can be compacted to merge scattered free space into one hole.
"""
