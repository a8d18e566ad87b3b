"""Period-derived statistics: ordering, lengths, averages, prediction, day status."""
