"""
Test suite for the jipper zip tool.

Component tests cover name transcoding, exclusion, password generation,
staging and mirroring; archive and orchestration tests build real archives
in temporary directories and read them back.
"""
