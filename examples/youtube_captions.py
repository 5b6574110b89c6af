"""
YouTube captions example.

Demonstrates fetching video details and captions from a YouTube video.
"""

import logging

from transcriptpro import YouTubeClient, CaptionsNotFound, format_time

# Configure logging to see transcriptpro internal logs
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def main():
    # YouTube video URL
    youtube_url = "https://www.youtube.com/watch?v=eSPJsnYY6_4"

    client = YouTubeClient()

    details = client.get_video_details(youtube_url)
    print(f"Title: {details.title}")
    print(f"Channel: {details.channel_name}")
    print(f"Duration: {format_time(details.duration or 0)}")

    print(f"\nAvailable caption languages: {client.list_caption_languages(youtube_url)}")

    try:
        captions = client.fetch_captions(youtube_url, language="en")
    except CaptionsNotFound as e:
        print(f"No English captions. Available: {e.available}")
        return

    print(f"\nFetched {len(captions)} caption entries")
    for entry in captions[:10]:
        print(f"{format_time(entry.start)} - {entry.text}")

if __name__ == "__main__":
    main()
