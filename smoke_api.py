# smoke_api.py
import sys
import pprint

import requests

URL = "http://127.0.0.1:8000/api/run"


def main(image_path: str, business_name: str) -> None:
    with open(image_path, "rb") as f:
        files = {"screenshot": (image_path.split("/")[-1], f, "image/png")}
        data = {"businessName": business_name}
        r = requests.post(URL, files=files, data=data, timeout=120)
    print("Status:", r.status_code)
    try:
        pprint.pprint(r.json())
    except ValueError:
        print(r.text)


if __name__ == "__main__":
    if len(sys.argv) != 3:
        sys.exit("usage: python smoke_api.py <image> <business name>")
    main(sys.argv[1], sys.argv[2])
