import os


os.environ.setdefault("QUERYCODER_LOG_LEVEL", "WARNING")
os.environ.setdefault("QUERYCODER_LOG_FORMAT", "console")
