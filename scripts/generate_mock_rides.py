import argparse
import logging

from rides.dataset import generate_mock_rides


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Generate a CSV of mock ride offers.")
    parser.add_argument("--count", type=int, default=200)
    parser.add_argument("--output", default="mock_rides.csv")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    df = generate_mock_rides(num_rides=args.count, output_file=args.output, seed=args.seed)

    print("\nRides by status:")
    for status, count in df["status"].value_counts().items():
        print(f"  {status}: {count}")
