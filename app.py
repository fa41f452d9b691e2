import os

from rideviz.viz.app.single import serve_viewer

DATA = os.environ.get("RIDERSHIP_JSON", "MTA_ridership_data.json")
CUTOFFS = os.environ.get("CUTOFFS", "fixed")


def main():
  port = int(os.environ.get("PORT", "8080"))

  serve_viewer(
      data_file=DATA,
      host=os.environ.get("HOST", "0.0.0.0"),  # IMPORTANT for Render
      port=port,
      title="NYC Subway Ridership",
      cutoffs=CUTOFFS,
  )


if __name__ == "__main__":
  main()
