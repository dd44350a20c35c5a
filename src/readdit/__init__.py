# ABOUTME: Readdit - book discovery with related-work recommendations.
# ABOUTME: Search Open Library, inspect a work, and read Reddit voices from the command line.
