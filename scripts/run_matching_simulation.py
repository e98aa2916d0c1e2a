import argparse
import logging
import random
from datetime import datetime, timedelta, timezone

from rewards import RewardsLedger, find_option
from rides import TripRequest, estimate_impact
from rides.dataset import CENTER_LAT, CENTER_LNG, generate_mock_rides, load_ride_offers, write_match_results
from rides.matching import match_with_fallback, policy_from_env
from routing import Coordinate, PassengerPickup, distance_km, sequence_pickups


def main():
    parser = argparse.ArgumentParser(description="Match a sample rider against a rides CSV.")
    parser.add_argument("--rides", default=None, help="rides CSV (generated if omitted)")
    parser.add_argument("--output", default="match_results.csv")
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=== STARTING MATCHING SIMULATION ===")
    now = datetime.now(timezone.utc)
    if args.rides is None:
        args.rides = "mock_rides.csv"
        generate_mock_rides(num_rides=300, output_file=args.rides, now=now, seed=args.seed)

    rides = load_ride_offers(args.rides)
    by_id = {ride.id: ride for ride in rides}

    request = TripRequest(
        origin=Coordinate(CENTER_LAT, CENTER_LNG),
        destination=Coordinate(CENTER_LAT + 0.09, CENTER_LNG + 0.09),
        departure_time=now + timedelta(hours=1),
        origin_label="Connaught Place",
        destination_label="Sample destination",
    )

    matches = match_with_fallback(request, rides, policy=policy_from_env())
    write_match_results(matches, args.output)

    print(f"\n--- Top matches ({len(matches)} total) ---")
    for match in matches[:5]:
        print(f"{match.ride_id}: {match.score:.1f} [{match.quality.value}] {match.reason}")

    if not matches:
        print("No bookable rides at all.")
        return

    # Sequence a few fake passengers for the best ride
    best = by_id[matches[0].ride_id]
    rng = random.Random(args.seed)
    passengers = [
        PassengerPickup(
            id=f"p_{i + 1}",
            pickup=Coordinate(best.origin.lat + rng.uniform(-0.02, 0.02), best.origin.lng + rng.uniform(-0.02, 0.02)),
        )
        for i in range(3)
    ]
    plan = sequence_pickups(best.origin, passengers, best.destination)
    print(f"\nPickup order for {best.id}: {' -> '.join(plan.passenger_ids)}")
    print(f"  {plan.total_distance_km:.2f} km, ~{plan.total_duration_min:.0f} min")

    shared_km = distance_km(best.origin, best.destination)
    impact = estimate_impact(shared_km, len(passengers))
    print(f"  CO2 saved: {impact.co2_saved_kg:.2f} kg, fuel saved: {impact.fuel_saved_liters:.2f} L")

    # Book it and walk through rewards
    ledger = RewardsLedger(rng=rng)
    earned = ledger.earn_for_ride("rider_1", best.price_per_seat, total_prior_rides=4, ride_id=best.id)
    print(f"\nRider earned {earned.total_points} points, cashback {earned.cashback:.2f}")
    result = ledger.redeem("rider_1", find_option("discount-10"))
    print(f"Redeem 'discount-10': {result.message}")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Results written to '{args.output}'.")


if __name__ == "__main__":
    main()
