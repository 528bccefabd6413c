"""
# Nanami: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

DEFAULT_MAX_RULE_DEPTH = 100

NAMA_FILE_EXTENSION = '.nama'
HTML_FILE_EXTENSION = '.html'

HTML5_TEMPLATE = '''\
<!DOCTYPE html>
<html>
<head>
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
{content}
</body>
</html>
'''
