import re

# Record identifiers: M24_230001, M1_999999, M100_123456
idPattern = r'M[0-9]+_[0-9]{6}'

# Tags: text between full-width brackets, e.g. 【sigh】
tagPattern = r'【([^】]+)】'

# Annotation/phonetic lines start with a tab
ANNOTATION_PREFIX = '\t'

compiled_id_pattern = re.compile(idPattern)
compiled_tag_pattern = re.compile(tagPattern)
