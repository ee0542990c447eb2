from hermes_ai.pipeline.submission import StageTimeouts, SubmissionPipeline, check_text
from hermes_ai.pipeline.upvote import upvote

__all__ = ["StageTimeouts", "SubmissionPipeline", "check_text", "upvote"]
