'''Fixed constants of the container format.

All the sizes are in bytes: a block holds exactly 36 cards.
'''

BLOCK_SIZE = 2880
CARD_LENGTH = 80
KEYWORD_LENGTH = 8

VALUE_INDICATOR = '='
COMMENT_DELIMITER = '/'
QUOTE = "'"

END_KEYWORD = 'END'
PRIMARY_KEYWORD = 'SIMPLE'
EXTENSION_KEYWORD = 'XTENSION'

BITPIX_KEYWORD = 'BITPIX'
NAXIS_KEYWORD = 'NAXIS'
PCOUNT_KEYWORD = 'PCOUNT'
GCOUNT_KEYWORD = 'GCOUNT'
GROUPS_KEYWORD = 'GROUPS'
EXTNAME_KEYWORD = 'EXTNAME'
EXTVER_KEYWORD = 'EXTVER'

MAX_NAXIS = 999

# these never have a value indicator in column 9
NO_INDICATOR_KEYWORDS = frozenset([
    '',
    'COMMENT',
    'HISTORY',
    'CONTINUE',
    'HIERARCH',  # ESO convention, the indicator comes later
    END_KEYWORD,
])
