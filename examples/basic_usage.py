"""
Basic TranscriptPro usage example.

Demonstrates normalizing a WebVTT caption file and merging the captions
into sentences.
"""

import sys

from transcriptpro import parse_file, merge_into_sentences, seconds_to_timestamp

def main():
    vtt_path = sys.argv[1] if len(sys.argv) > 1 else "captions.vtt"

    # Parse captions
    print(f"Parsing {vtt_path}...")
    captions = parse_file(vtt_path)
    print(f"Parsed {len(captions)} caption entries")

    # Merge into sentences
    sentences = merge_into_sentences(captions)
    print(f"Merged into {len(sentences)} sentences\n")

    for sentence in sentences:
        print(f"[{seconds_to_timestamp(sentence.start)}] {sentence.text}")

if __name__ == "__main__":
    main()
