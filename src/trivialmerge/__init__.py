"""trivialmerge - resolve trivial diff3 merge conflicts."""
