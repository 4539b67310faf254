CHUNK = "chunk"
ERROR = "error"
DONE = "done"
