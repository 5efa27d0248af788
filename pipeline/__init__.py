# pipeline/ — batch scripts for BuckTrax.
#
#   01_predict_movement → movement prediction JSON for each tagged profile
