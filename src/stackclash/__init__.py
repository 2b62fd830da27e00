"""StackClash: rising-stack match-three simulation core."""
