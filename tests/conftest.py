import os

# keep test runs offline; the untrained sentence tokenizer is enough here
os.environ.setdefault("NLTK_AUTO_DOWNLOAD", "0")
