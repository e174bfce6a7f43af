"""Fixed messages returned by the diff engine."""

NO_DIFF_MESSAGE = "Compared values have no visual difference."

SIMILAR_MESSAGE = (
    "Compared values serialize to the same structure.\n"
    "Printing internal object structure without calling `to_dict` instead."
)

NO_NEWLINE_MARKER = "\\ No newline at end of file"
