"""Basic usage examples for the marshal data reader and compiler."""

from pathlib import Path

from rallymarshal import LocalFileStore, MarshalDataReader, ResultCompiler, load_rally_config

DATA_DIR = Path(__file__).parent / "data"


def main() -> None:
    store = LocalFileStore(DATA_DIR)

    config = load_rally_config(store, "rally_config.json")
    print(f"=== {config.name} ===")
    for c in config.checkpoints:
        print(f"  {c.name}: expected at +{c.expected_arrival_offset}")

    # Read and validate the scan table
    result = MarshalDataReader().read_file(store, "marshal_data.csv", config.checkpoints)
    if not result:
        print(f"\nRead failed: {result.error}")
        return

    print(f"\n=== {len(result.records)} cars read ===")

    results = ResultCompiler().compile(config, result.records)
    for car in results:
        print(f"\n  {car.car_code}")
        for record in car.checkpoint_records:
            if record.has_scans:
                print(f"    {record.checkpoint_name}: arrived {record.actual_arrival_time}")
            else:
                print(f"    {record.checkpoint_name}: no scan (penalty {record.time_penalty})")


if __name__ == "__main__":
    main()
