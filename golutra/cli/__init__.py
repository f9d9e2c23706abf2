"""Interactive command-line front end: command parsing, rendering and the REPL."""