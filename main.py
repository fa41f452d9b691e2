# rideviz/main.py

from rideviz.viz.app.single import serve_viewer


DATA = "MTA_ridership_data.json"

# slider index -> label shown above the time bar
ANNOTATIONS = {37: "Intense Flooding"}


def main():
    serve_viewer(
        data_file=DATA,
        port=8080,
        title="NYC Subway Ridership",
        cutoffs="fixed",
        annotations=ANNOTATIONS,
    )


if __name__ == "__main__":
    main()
