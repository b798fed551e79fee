# Upper bound of a PostgreSQL INTEGER column (all primary keys and user ids)
MAX_INT_ID = 2**31 - 1
