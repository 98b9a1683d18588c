# Settings for technology progression

# Sentinel year meaning "never happened / not recorded"
DATE_NONE = -1

# First year of each era after the Star League, in era order.  Any year
# before the first entry belongs to the Star League era.
ERA_START_YEARS = (2781, 3050, 3131)

# Rating codes applied to freshly constructed records
DEFAULT_TECH_RATING = "C"
DEFAULT_AVAILABILITY = "A"

# Labels used when formatting dates for display
APPROXIMATE_PREFIX = "~"
DATE_NONE_LABEL = "-"
