from __future__ import annotations

CANONICAL = (
    "@host = http://localhost\n"
    "@token = abc\n"
    "\n"
    "# Create a user\n"
    "# @prompt password\n"
    "# @name createUser\n"
    "POST {{host}}/users HTTP/1.1\n"
    "Content-Type: application/json\n"
    "Authorization: Bearer {{token}}\n"
    "\n"
    "{\n"
    '  "name": "x"\n'
    "}\n"
    "\n"
    "### second\n"
    "\n"
    "GET {{host}}/users HTTP/2\n"
    "accept: application/json\n"
)

MESSY = (
    "// Create a user\n"
    "# @name createUser\n"
    "# @prompt password\n"
    "POST {{host}}/users\n"
    "content-type:application/json\n"
    "@host = http://localhost\n"
    "\n"
    '{"a": 1}\n'
    "###\n"
    "GET {{host}}/health\n"
)

MESSY_FORMATTED = (
    "@host = http://localhost\n"
    "\n"
    "# Create a user\n"
    "# @prompt password\n"
    "# @name createUser\n"
    "POST {{host}}/users HTTP/1.1\n"
    "Content-Type: application/json\n"
    "\n"
    '{"a": 1}\n'
    "\n"
    "###\n"
    "\n"
    "GET {{host}}/health HTTP/1.1\n"
)

INVALID = "# just a comment\nContent-Type: text/plain\n"
