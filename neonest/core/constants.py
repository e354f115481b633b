"""Application constants."""

# Average Gregorian month, expressed as an exact fraction (30.4375 days = 304375 / 10000)
DAYS_PER_MONTH_NUMERATOR = 304_375
DAYS_PER_MONTH_DENOMINATOR = 10_000

DAYS_PER_WEEK = 7
FULL_TERM_WEEKS = 40

# Corrected age is used for developmental comparisons until this age
CORRECTED_AGE_CUTOFF_MONTHS = 24

# Display text switches from weeks to months at this many weeks
WEEKS_DISPLAY_THRESHOLD = 12

# Catalog age filtering (months around the expected window)
UPCOMING_LOOKAHEAD_MONTHS = 2
LATE_ACHIEVER_GRACE_MONTHS = 1

# Record store keys. Profiles share one list; records are kept per baby
BABY_PROFILES_KEY = "baby_profiles"
MILESTONE_RECORDS_KEY = "milestone_records"  # + ":{baby_id}"
RECORD_OWNER_KEY = "milestone_record_owner"  # + ":{record_id}", value is the baby id
