"""HTTP clients: only header probes and spider runs count as read-only."""

from .base import Classifier, has_short_option

_CURL_WRITE_FLAGS = (
    "-o",
    "--output",
    "-O",
    "--remote-name",
    "--remote-name-all",
    "-X",
    "--request",
    "-d",
    "--data",
    "--data-raw",
    "--data-binary",
    "--data-urlencode",
    "--json",
    "-F",
    "--form",
    "-T",
    "--upload-file",
    "-c",
    "--cookie-jar",
    "-D",
    "--dump-header",
    "--trace",
    "--trace-ascii",
    "--stderr",
    "-K",
    "--config",
    "-w",
    "--write-out",
    "-Q",
    "--quote",
    "--libcurl",
    "--etag-save",
    "--hsts",
    "--alt-svc",
)

_WGET_WRITE_FLAGS = (
    "-o",
    "--output-file",
    "-a",
    "--append-output",
    "-O",
    "--output-document",
    "--post-data",
    "--post-file",
    "--method",
    "--body-data",
    "--body-file",
    "-e",
    "--execute",
    "--config",
    "--save-cookies",
    "--warc-file",
    "--use-askpass",
)


class NetworkClassifier(Classifier):
    priority = 70
    tools = ("curl", "wget")

    @property
    def name(self) -> str:
        return "network"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        if tool == "curl":
            return has_short_option(args, "-I", "--head") and not has_short_option(args, *_CURL_WRITE_FLAGS)
        return has_short_option(args, "--spider") and not has_short_option(args, *_WGET_WRITE_FLAGS)
