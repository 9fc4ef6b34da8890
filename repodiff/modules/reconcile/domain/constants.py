"""Constants shared across reconcile domain models."""

SNAPSHOT_MARKER = "SNAPSHOT"

ARTIFACT_SUFFIX = ".jar"
DESCRIPTOR_SUFFIX = ".pom"
CANDIDATE_SUFFIXES = (ARTIFACT_SUFFIX, DESCRIPTOR_SUFFIX)

# group / artifact / version / file name
MIN_PATH_SEGMENTS = 4

PROGRESS_LOG_INTERVAL = 500
